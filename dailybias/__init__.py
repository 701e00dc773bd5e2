"""
dailybias - learning scheduler for cognitive biases.

Three cooperating engines over a shared catalog and progress model:

- daily: deterministic, personalized bias-of-the-day selection
- review: spaced repetition scheduling on a fixed interval ladder
- quiz: multiple-choice session generation, answering and statistics

All engines are pure functions over immutable values. Persistence and
clocks are supplied by the caller.
"""

__version__ = "0.1.0"
