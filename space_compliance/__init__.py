"""
SpaceCompliance - A compliance scoring and gap-analysis engine for space
operators.

Turns an operator profile, a catalog of jurisdiction requirements and a set of
assessment statuses into a weighted score, a risk level, a prioritized gap
list, recommendations and a documentation checklist.
"""

__version__ = "0.1.0"
__author__ = "SpaceCompliance Team"
