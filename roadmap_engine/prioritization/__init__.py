"""
Prioritization: assigns each recommendation a numeric score and a priority
class, and orders recommendation lists by them.

Modules
-------
scorer : PriorityRule table + calculate_priority() + score_recommendation()
         — pure functions, no I/O.
ranker : rank_recommendations() + prioritize_recommendations().
"""
