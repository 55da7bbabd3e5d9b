"""
Roadmap engine: turns a flat list of recommendations into ordered execution
phases with time estimates, a critical path, and quick wins.

Modules
-------
dependencies : DependencyRule table + identify_dependencies().
graph        : build_dependency_graph() + topological_sort() +
               calculate_depths() + find_critical_path().
phases       : quick_win_score() + group_into_phases() + create_phases().
estimates    : per-recommendation, per-phase, and total time estimates.
generator    : identify_quick_wins() + generate_roadmap() +
               generate_statistics() — the single entry point.

Every function is pure: inputs are never mutated and no state outlives a call.
"""
