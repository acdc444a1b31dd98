from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    """Counters shown on the dashboard landing page."""

    total_notes: int
    total_tasks: int
    completed_tasks: int
    total_focus_sessions: int
    total_study_time: int = Field(..., description="Minutes spent in completed focus sessions")
    streak_days: int = Field(..., description="Current focus-session streak")
    longest_streak: int
