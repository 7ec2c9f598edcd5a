"""
Loop recommendation engine.

Scores candidate activities against a user's stated and learned preferences,
applies sponsorship and diversity rules, explains each pick, and learns from
feedback.
"""
