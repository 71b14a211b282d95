"""
RODA Audio System - synthesized tick and win sounds.
"""

from .engine import AudioEngine, get_audio_engine
from .feedback import FeedbackPlayer, FeedbackSink, attach_feedback

__all__ = ["AudioEngine", "get_audio_engine", "FeedbackPlayer", "FeedbackSink", "attach_feedback"]
