"""
Profile learning from feedback.

Responsibilities:
- Model the learned AI profile and feedback events.
- Fold each feedback event into the profile with deterministic rules.
"""
