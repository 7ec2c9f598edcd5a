"""
Recommendation scoring and ranking.

Responsibilities:
- Score candidates on interest, location, time, feedback and collaborative signals.
- Apply the bounded sponsor boost.
- Enforce duplicate-business, sponsorship-ratio and category-diversity rules.
- Produce short templated explanations for each pick.
"""
