"""
Configuration module.

Frozen dataclass defaults layered with an optional YAML file and explicit
overrides from the command line.
"""
