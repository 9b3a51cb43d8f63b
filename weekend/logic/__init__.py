"""Core scheduling logic layer.

Subpackages:
- timing: "HH:MM" clock arithmetic
- scheduling: conflict detection and the schedule engine
- planning: the plan store (current plan, saved plans, custom activities)
"""
__all__ = ["timing", "scheduling", "planning"]
