"""Configuration schema version definitions.

Each version module contains the complete specification for that version:
- Schema models and their structural tags
- Default values applied on request
- Upgrade logic to the next version

Modules import their successor only, so the upgrade chain always points
forward and ends at the latest version.
"""
