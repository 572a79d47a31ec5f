from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UploadRef(BaseModel):
    """A screenshot already uploaded to the temp-uploads bucket."""

    model_config = ConfigDict(frozen=True)

    path: str
    name: str


class Top25Row(BaseModel):
    rank: int
    team: str


class RankingsExtract(BaseModel):
    top25: List[Top25Row] = []


class ScheduledGame(BaseModel):
    week: Optional[int] = None
    home: Optional[str] = None
    away: Optional[str] = None
    neutral: Optional[bool] = None


class ScheduleExtract(BaseModel):
    games: List[ScheduledGame] = []


class GameResult(BaseModel):
    home: Optional[str] = None
    away: Optional[str] = None
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    week: Optional[int] = None


class ResultsExtract(BaseModel):
    games: List[GameResult] = []


class ExtractedWeek(BaseModel):
    """Structured data the vision model read from the screenshots.

    Every section is optional: the model sets a key to null when that kind of
    screen was not among the uploads, and omits values it could not read.
    """

    model_config = ConfigDict(extra="ignore")

    season_id: Optional[int] = None
    week: Optional[int] = None
    rankings: Optional[RankingsExtract] = None
    schedules: Optional[ScheduleExtract] = None
    results: Optional[ResultsExtract] = None
    notes: List[str] = []


class WeeklyPreview(BaseModel):
    """Response of process_weekly, reviewed by the commissioner before publishing."""

    season_id: int = Field(..., gt=0)
    week: int = Field(..., gt=0)
    preview: ExtractedWeek = Field(default_factory=ExtractedWeek)
