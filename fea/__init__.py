from .domain import EMOTIONS, EmotionSample, Insight, SavedSessionRecord, Session
from .config import AnalyticsConfig, get_settings, reload_settings
from .analytics import analyze_session, SessionReport
from .session import SessionRecorder, JsonlSessionStore, InMemorySessionStore, save_session
