"""Self-play runner internals.

Modules:
- constants: tool names and the literals of a default self-play match
- types: dataclasses for MatchParams, BuildParams, BotSpec and Plan
- build / match: the cargo and halite invocations
- exec: core orchestration logic
"""
