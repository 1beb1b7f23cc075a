"""
Journey-based browser tests for the EST Poker wizard.

Journeys run against the mock front-end started by `mock_estpoker_server`.
Each test replays the earlier steps of the journey on a fresh browser, so a
single test can be run on its own.

Journey Order:
    01 - Regular Admin journey (intro, admin name, room, stories)
"""
