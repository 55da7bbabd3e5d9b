"""
Roadmap export for the downstream report and compatibility collaborators.

Modules
-------
export : roadmap_to_dict() + flatten_phases_for_export() +
         write_roadmap_json() + write_phase_csv() — file output only.
"""
