"""Core framework components for RODA."""

from .state import SpinState, StateMachine
from .events import EventBus, Event, EventType

__all__ = ["SpinState", "StateMachine", "EventBus", "Event", "EventType"]
