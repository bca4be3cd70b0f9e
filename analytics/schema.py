from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from numbers import Number
from typing import Iterable, Mapping

import pandas as pd

from constants import PERIOD_ORDER, PITCH_MAX, PITCH_MIN
from utils import is_missing, optional_float


class MatchPeriod(str, Enum):
    FIRST_HALF = "1H"
    SECOND_HALF = "2H"
    EXTRA_TIME_1 = "ET1"
    EXTRA_TIME_2 = "ET2"
    PENALTIES = "P"

    def serialize(self) -> str:
        return self.value

    @property
    def order(self) -> int:
        return PERIOD_ORDER.index(self.value)

    @classmethod
    def parse(cls, raw: object) -> "MatchPeriod":
        if isinstance(raw, cls):
            return raw
        if is_missing(raw):
            raise ValueError("match period is missing")

        token = str(raw).strip()
        if not token:
            raise ValueError("match period is empty")

        if token.startswith("MatchPeriod."):
            token = token.split(".", 1)[1]

        member = cls.__members__.get(token)
        if member is not None:
            return member

        try:
            return cls(token.upper())
        except ValueError as exc:
            raise ValueError(f"unknown match period: {raw}") from exc


def _check_pair(name: str, x, y) -> tuple[float | None, float | None]:
    x = optional_float(x)
    y = optional_float(y)
    if (x is None) != (y is None):
        raise ValueError(f"{name} coordinates must be given together, got x={x} y={y}")
    for value in (x, y):
        if value is not None and not PITCH_MIN <= value <= PITCH_MAX:
            raise ValueError(f"{name} coordinate {value} outside [{PITCH_MIN:g}, {PITCH_MAX:g}]")
    return x, y


def _parse_tags(raw) -> frozenset[int]:
    if raw is None:
        return frozenset()
    if isinstance(raw, (str, bytes)):
        raise ValueError(f"tags must be a collection of integer codes, got {raw!r}")
    codes = set()
    try:
        for tag in raw:
            if isinstance(tag, Mapping):
                tag = tag.get("tagId", tag.get("tag_id"))
            codes.add(int(tag))
    except TypeError as exc:
        raise ValueError(f"tags must be a collection of integer codes, got {raw!r}") from exc
    return frozenset(codes)


@dataclass(frozen=True)
class MatchEvent:
    """One tagged, timestamped match event as delivered by the query layer.

    Coordinates are normalized pitch units; start and end pairs are each
    all-or-nothing.
    """

    event_name: str
    match_period: MatchPeriod
    event_second: float
    team_id: str
    event_type_code: int = 0
    sub_event_name: str | None = None
    start_x: float | None = None
    start_y: float | None = None
    end_x: float | None = None
    end_y: float | None = None
    player_id: str | None = None
    tags: frozenset[int] = field(default_factory=frozenset)
    event_id: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "match_period", MatchPeriod.parse(self.match_period))

        second = optional_float(self.event_second)
        if second is None or second < 0:
            raise ValueError(f"event_second must be a non-negative number, got {self.event_second!r}")
        object.__setattr__(self, "event_second", second)

        start_x, start_y = _check_pair("start", self.start_x, self.start_y)
        end_x, end_y = _check_pair("end", self.end_x, self.end_y)
        object.__setattr__(self, "start_x", start_x)
        object.__setattr__(self, "start_y", start_y)
        object.__setattr__(self, "end_x", end_x)
        object.__setattr__(self, "end_y", end_y)

        object.__setattr__(self, "tags", _parse_tags(self.tags))
        if is_missing(self.sub_event_name) or self.sub_event_name == "":
            object.__setattr__(self, "sub_event_name", None)
        if is_missing(self.player_id):
            object.__setattr__(self, "player_id", None)

    @property
    def has_start(self) -> bool:
        return self.start_x is not None

    @property
    def has_end(self) -> bool:
        return self.end_x is not None

    @property
    def display_name(self) -> str:
        if self.sub_event_name:
            return f"{self.event_name} ({self.sub_event_name})"
        return self.event_name

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> "MatchEvent":
        """Build an event from a snake_case or camelCase record."""

        def pick(*keys, default=None):
            for key in keys:
                if key in record and not is_missing(record[key]):
                    return record[key]
            return default

        team = pick("team_id", "teamId")
        if team is None and isinstance(record.get("team"), Mapping):
            team = record["team"].get("id")
        if team is None:
            raise ValueError("event record has no team id")

        player = pick("player_id", "playerId")
        if player is None and isinstance(record.get("player"), Mapping):
            player = record["player"].get("id")

        event_id = pick("event_id", "id")
        return cls(
            event_name=str(pick("event_name", "eventName", default="")),
            sub_event_name=pick("sub_event_name", "subEventName"),
            match_period=pick("match_period", "matchPeriod"),
            event_second=pick("event_second", "eventSec", "eventSecond"),
            team_id=str(team),
            player_id=None if player is None else str(player),
            event_type_code=int(pick("event_type_code", "eventTypeCode", "eventId", default=0)),
            start_x=pick("start_x", "startX"),
            start_y=pick("start_y", "startY"),
            end_x=pick("end_x", "endX"),
            end_y=pick("end_y", "endY"),
            tags=pick("tags", default=()),
            event_id=None if event_id is None else str(event_id),
        )


@dataclass(frozen=True)
class TableContract:
    name: str
    columns: Mapping[str, str]

    def empty(self) -> pd.DataFrame:
        return pd.DataFrame({col: pd.Series(dtype=dtype) for col, dtype in self.columns.items()})

    def missing_columns(self, df: pd.DataFrame, required: Iterable[str]) -> list[str]:
        return [col for col in required if col not in df.columns]


EVENT_CONTRACT = TableContract(
    name="match_event",
    columns={
        "event_id": "string",
        "event_type_code": "int64",
        "event_name": "string",
        "sub_event_name": "string",
        "match_period": "string",
        "event_second": "float64",
        "start_x": "float64",
        "start_y": "float64",
        "end_x": "float64",
        "end_y": "float64",
        "team_id": "string",
        "player_id": "string",
        "tags": "object",
    },
)

REQUIRED_EVENT_COLUMNS = ("event_name", "match_period", "event_second", "team_id")


def events_to_frame(events: Iterable[MatchEvent]) -> pd.DataFrame:
    """Flatten events into the canonical event table."""
    rows = [
        {
            "event_id": event.event_id,
            "event_type_code": event.event_type_code,
            "event_name": event.event_name,
            "sub_event_name": event.sub_event_name,
            "match_period": event.match_period.serialize(),
            "event_second": event.event_second,
            "start_x": event.start_x,
            "start_y": event.start_y,
            "end_x": event.end_x,
            "end_y": event.end_y,
            "team_id": event.team_id,
            "player_id": event.player_id,
            "tags": sorted(event.tags),
        }
        for event in events
    ]
    if not rows:
        return EVENT_CONTRACT.empty()
    return pd.DataFrame(rows, columns=list(EVENT_CONTRACT.columns))


def events_from_frame(df: pd.DataFrame) -> list[MatchEvent]:
    """Parse an event table into validated MatchEvent records.

    Raises ValueError when required columns are absent or a row violates the
    event invariants; the row position is included in the message.
    """
    if df is None or df.empty:
        return []

    missing = EVENT_CONTRACT.missing_columns(df, REQUIRED_EVENT_COLUMNS)
    if missing:
        raise ValueError(f"event table missing required columns: {missing}")

    events = []
    for position, record in enumerate(df.to_dict(orient="records")):
        try:
            record["tags"] = _frame_tags(record.get("tags"))
            events.append(MatchEvent.from_record(record))
        except ValueError as exc:
            raise ValueError(f"invalid event at row {position}: {exc}") from exc
    return events


def _frame_tags(tags):
    """Normalise a table cell into a tag collection: lists, "a,b"/"a;b" strings or one bare code."""
    if isinstance(tags, str):
        cleaned = tags.strip("[]() ").replace(";", ",")
        return [int(tok) for tok in cleaned.split(",") if tok.strip()]
    if isinstance(tags, (list, tuple, set, frozenset)):
        return tags
    if is_missing(tags):
        return ()
    if isinstance(tags, Number):
        # CSV columns holding a single code per row load as int or float.
        return [int(tags)]
    return tags
