import re
from typing import Dict, Optional
from urllib.parse import urlencode

from pydantic import BaseModel

from shortcut_core.capabilities.models import ViralMoment

_START_TIME = re.compile(r"(\d{1,2}):(\d{2})")
_LEADING_INT = re.compile(r"^\s*(\d+)")
FALLBACK_END_TIME = "0:15"


class ScriptIntent(BaseModel):
    """
    Hand-off from the analysis page to the script page.

    Travels as typed query parameters and only pre-fills the script form once.
    """

    video_url: Optional[str] = None
    start_time: Optional[str] = None
    duration: Optional[str] = None
    category: Optional[str] = None

    @classmethod
    def from_viral_moment(
        cls, video_url: str, moment: ViralMoment, category: Optional[str] = None
    ) -> "ScriptIntent":
        # Moments sometimes come back as a range ("0:45 - 0:57"); keep the start.
        return cls(
            video_url=video_url,
            start_time=moment.timestamp.split(" - ")[0],
            duration=moment.duration,
            category=category,
        )

    def to_query(self) -> str:
        return urlencode(self.model_dump(exclude_none=True))

    def form_values(self) -> Dict[str, str]:
        values: Dict[str, str] = {}
        if self.video_url:
            values["video_url"] = self.video_url

        if self.start_time:
            match = _START_TIME.search(self.start_time)
            if match:
                minutes, seconds = match.group(1), match.group(2)
                values["start_time"] = f"{minutes}:{seconds}"
                if self.duration:
                    values["end_time"] = self._end_time(int(minutes), int(seconds))

        if self.duration:
            values["duration"] = self.duration
        if self.category:
            values["category"] = self.category
        return values

    def _end_time(self, minutes: int, seconds: int) -> str:
        match = _LEADING_INT.match(self.duration or "")
        if not match:
            return FALLBACK_END_TIME
        total = minutes * 60 + seconds + int(match.group(1))
        return f"{total // 60}:{total % 60:02d}"
