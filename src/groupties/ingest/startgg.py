"""start.gg GraphQL adapter that turns paginated sets into match records."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from groupties.config import DEFAULT_FEED_SETTINGS, FeedSettings
from groupties.models import MalformedRecordError, MatchRecord
from groupties.standings import MatchResultStore


logger = logging.getLogger(__name__)

SCORES_QUERY = """
query ScoresQuery($eventSlug: String!, $page: Int!, $perPage: Int!) {
  event(slug: $eventSlug) {
    sets(page: $page, perPage: $perPage, sortType: STANDARD) {
      pageInfo {
        totalPages
      }
      nodes {
        phaseGroup {
          displayIdentifier
          phase {
            name
          }
        }
        slots {
          entrant {
            participants {
              id
              gamerTag
            }
          }
          standing {
            placement
          }
        }
      }
    }
  }
}
"""


class FeedError(RuntimeError):
    """Raised when the results feed cannot deliver a usable page."""


class FeedHTTPError(FeedError):
    """Transport failure or non-success HTTP status."""


class GraphQLError(FeedError):
    def __init__(self, errors: List[Any]):
        super().__init__(f"{len(errors)} GraphQL errors")
        self.errors = errors


class NoDataError(FeedError):
    def __init__(self) -> None:
        super().__init__("GraphQL response returned neither `data` nor `errors`")


class ResponseFormatError(FeedError):
    """The response did not have the shape of a scores query result."""


class _Wire(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class _Participant(_Wire):
    id: Optional[Union[int, str]] = None
    gamer_tag: Optional[str] = Field(default=None, alias="gamerTag")


class _Entrant(_Wire):
    participants: Optional[List[Optional[_Participant]]] = None


class _Standing(_Wire):
    placement: Optional[int] = None


class _Slot(_Wire):
    entrant: Optional[_Entrant] = None
    standing: Optional[_Standing] = None


class _Phase(_Wire):
    name: Optional[str] = None


class _PhaseGroup(_Wire):
    display_identifier: Optional[str] = Field(default=None, alias="displayIdentifier")
    phase: Optional[_Phase] = None


class _Set(_Wire):
    phase_group: Optional[_PhaseGroup] = Field(default=None, alias="phaseGroup")
    slots: Optional[List[Optional[_Slot]]] = None


class _PageInfo(_Wire):
    total_pages: Optional[int] = Field(default=None, alias="totalPages")


class _Sets(_Wire):
    page_info: Optional[_PageInfo] = Field(default=None, alias="pageInfo")
    nodes: Optional[List[Optional[_Set]]] = None


class _Event(_Wire):
    sets: Optional[_Sets] = None


class _ScoresData(_Wire):
    event: Optional[_Event] = None


@dataclass
class FeedPage:
    total_pages: int
    records: List[MatchRecord] = field(default_factory=list)
    player_names: Dict[str, str] = field(default_factory=dict)


def _slot_entry(slot: Optional[_Slot]) -> tuple[Union[int, str], str, int]:
    if (
        slot is None
        or slot.entrant is None
        or slot.entrant.participants is None
        or slot.standing is None
        or slot.standing.placement is None
    ):
        raise ResponseFormatError("set slot is missing its entrant or standing")
    if len(slot.entrant.participants) != 1:
        raise ResponseFormatError("expected exactly one participant per entrant")
    participant = slot.entrant.participants[0]
    if participant is None or participant.id is None or participant.gamer_tag is None:
        raise ResponseFormatError("participant is missing its id or gamer tag")
    return participant.id, participant.gamer_tag, slot.standing.placement


def parse_scores_response(payload: Mapping[str, Any], *, phase_name: str = "Groups") -> FeedPage:
    """Convert one scores query response into match records for the given phase."""

    data = payload.get("data")
    errors = payload.get("errors")
    if errors:
        raise GraphQLError(list(errors))
    if data is None:
        if errors is not None:
            raise GraphQLError([])
        raise NoDataError()

    try:
        parsed = _ScoresData.model_validate(data)
    except ValidationError as exc:
        raise ResponseFormatError(str(exc)) from exc

    event = parsed.event
    if (
        event is None
        or event.sets is None
        or event.sets.page_info is None
        or event.sets.page_info.total_pages is None
        or event.sets.nodes is None
    ):
        raise ResponseFormatError("no match on response format")

    page = FeedPage(total_pages=event.sets.page_info.total_pages)
    for node in event.sets.nodes:
        if (
            node is None
            or node.phase_group is None
            or node.phase_group.display_identifier is None
            or node.phase_group.phase is None
            or node.phase_group.phase.name is None
            or node.slots is None
        ):
            raise ResponseFormatError("set is missing its phase group or slots")
        if node.phase_group.phase.name != phase_name:
            continue
        if len(node.slots) != 2:
            raise ResponseFormatError(f"expected two slots per set, got {len(node.slots)}")
        id_a, name_a, placement_a = _slot_entry(node.slots[0])
        id_b, name_b, placement_b = _slot_entry(node.slots[1])
        try:
            record = MatchRecord.from_placements(
                node.phase_group.display_identifier,
                id_a,
                id_b,
                placement_a,
                placement_b,
                player_a_name=name_a,
                player_b_name=name_b,
            )
        except ValidationError as exc:
            raise MalformedRecordError(str(exc)) from exc
        page.records.append(record)
        page.player_names[record.player_a] = name_a
        page.player_names[record.player_b] = name_b
    return page


class RequestThrottle:
    """Enforce a minimum interval between the end of one request and the start of the next."""

    def __init__(
        self,
        interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._next_request: float | None = None

    def wait(self) -> None:
        if self._next_request is None:
            return
        delay = self._next_request - self._clock()
        if delay > 0:
            self._sleep(delay)

    def mark(self) -> None:
        self._next_request = self._clock() + self.interval


class StartGGFeed:
    """Page through an event's sets and yield group-phase match records."""

    def __init__(
        self,
        api_key: str,
        event_slug: str,
        *,
        settings: FeedSettings | None = None,
        client: httpx.Client | None = None,
        throttle: RequestThrottle | None = None,
    ):
        self.settings = settings or DEFAULT_FEED_SETTINGS
        self.event_slug = event_slug
        self._api_key = api_key
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=self.settings.timeout,
            headers={"User-Agent": self.settings.user_agent},
        )
        self.throttle = throttle or RequestThrottle(self.settings.request_interval)

    def __enter__(self) -> "StartGGFeed":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _post(self, page: int) -> Mapping[str, Any]:
        body = {
            "query": SCORES_QUERY,
            "operationName": "ScoresQuery",
            "variables": {
                "eventSlug": self.event_slug,
                "page": page,
                "perPage": self.settings.per_page,
            },
        }
        attempt = 0
        while True:
            self.throttle.wait()
            try:
                resp = self._client.post(
                    self.settings.endpoint,
                    json=body,
                    headers={"Authorization": f"Bearer {self._api_key}"},
                )
                resp.raise_for_status()
                payload = resp.json()
            except httpx.TransportError as exc:
                if attempt < self.settings.max_retries:
                    attempt += 1
                    logger.warning("Request for page %s failed (%s); retry %s/%s", page, exc, attempt, self.settings.max_retries)
                    continue
                raise FeedHTTPError(f"request for page {page} failed: {exc}") from exc
            except httpx.HTTPStatusError as exc:
                raise FeedHTTPError(
                    f"page {page} returned HTTP {exc.response.status_code}: {exc.response.text[:200]}"
                ) from exc
            except ValueError as exc:
                raise ResponseFormatError(f"page {page} did not return JSON") from exc
            finally:
                self.throttle.mark()
            if not isinstance(payload, dict):
                raise ResponseFormatError(f"page {page} returned a non-object JSON body")
            return payload

    def fetch_page(self, page: int) -> FeedPage:
        result = parse_scores_response(self._post(page), phase_name=self.settings.phase_name)
        logger.info(
            "Fetched page %s/%s of %s (%s group matches)",
            page,
            result.total_pages,
            self.event_slug,
            len(result.records),
        )
        return result

    def iter_pages(self) -> Iterator[FeedPage]:
        first = self.fetch_page(1)
        yield first
        for page in range(2, first.total_pages + 1):
            yield self.fetch_page(page)

    def iter_records(self) -> Iterator[MatchRecord]:
        for page in self.iter_pages():
            yield from page.records

    def ingest_into(self, store: MatchResultStore) -> List[MatchRecord]:
        """Feed every page into ``store`` and return the records in feed order."""

        records: List[MatchRecord] = []
        for page in self.iter_pages():
            for player_id, name in page.player_names.items():
                store.set_player_name(player_id, name)
            store.add_records(page.records)
            records.extend(page.records)
        return records
