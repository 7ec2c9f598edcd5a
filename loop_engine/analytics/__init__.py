"""
In-memory analytics for recommendation runs and feedback.
"""
