from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class BlockColor(Enum):
    RED = ("Red", "#FFB3B3")
    GREEN = ("Green", "#B3FFB3")
    BLUE = ("Blue", "#B3D9FF")
    YELLOW = ("Yellow", "#FFFFB3")
    PURPLE = ("Purple", "#E6B3FF")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def hex(self) -> str:
        return self.value[1]

    @classmethod
    def from_name(cls, name: Optional[str]) -> "BlockColor":
        for color in cls:
            if color.label == name:
                return color
        raise ValueError(f"Unknown block color: {name!r}")

    @classmethod
    def hex_for(cls, name: Optional[str], default: str = "#FFFFFF") -> str:
        try:
            return cls.from_name(name).hex
        except ValueError:
            return default


def _time(value: Any) -> Optional[str]:
    # PocketBase stores an unset text field as ""
    return value or None


@dataclass
class Block:
    id: str
    title: str
    color: str
    date: str  # YYYY-MM-DD
    x: int = 0
    y: int = 0

    @classmethod
    def from_record(cls, r: Dict[str, Any]) -> "Block":
        return cls(
            id=r["id"],
            title=r.get("title") or "",
            color=r.get("color") or "",
            date=str(r.get("date") or "")[:10],
            x=int(r.get("x") or 0),
            y=int(r.get("y") or 0),
        )


@dataclass
class Task:
    id: str
    block_id: str
    title: str
    time: Optional[str] = None  # HH:MM
    completed: bool = False

    @classmethod
    def from_record(cls, r: Dict[str, Any]) -> "Task":
        return cls(
            id=r["id"],
            block_id=r.get("block_id") or "",
            title=r.get("title") or "",
            time=_time(r.get("time")),
            completed=bool(r.get("completed")),
        )

    def to_payload(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload.pop("id")
        return payload


@dataclass
class LibraryBlock:
    id: str
    title: str
    color: str

    @classmethod
    def from_record(cls, r: Dict[str, Any]) -> "LibraryBlock":
        return cls(id=r["id"], title=r.get("title") or "", color=r.get("color") or "")


@dataclass
class LibraryTask:
    id: str
    block_id: str  # library block id
    title: str
    time: Optional[str] = None
    completed: bool = False

    @classmethod
    def from_record(cls, r: Dict[str, Any]) -> "LibraryTask":
        return cls(
            id=r["id"],
            block_id=r.get("block_id") or "",
            title=r.get("title") or "",
            time=_time(r.get("time")),
            completed=bool(r.get("completed")),
        )

    def copy_to(self, block_id: str) -> Dict[str, Any]:
        """Insert payload for a Task of `block_id` built from this template task."""
        return {"block_id": block_id, "title": self.title, "time": self.time, "completed": self.completed}


@dataclass
class BacklogItem:
    id: str
    title: str

    @classmethod
    def from_record(cls, r: Dict[str, Any]) -> "BacklogItem":
        return cls(id=r["id"], title=r.get("title") or "")
