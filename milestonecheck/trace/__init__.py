"""Trace system for event logging."""

from milestonecheck.trace.replay import load_events
from milestonecheck.trace.schema import Event, EventType, new_event, now_iso
from milestonecheck.trace.store_jsonl import JsonlTraceStore

__all__ = ["Event", "EventType", "new_event", "now_iso", "JsonlTraceStore", "load_events"]
