# modelgen/logging/tags.py
"""
Logging subsystem tags.

Prefixed to log messages so build output stays searchable.
Changing a tag here updates it project-wide.
"""

BUILD = "[BUILD]"
CACHE = "[CACHE]"
SYNTH = "[SYNTH]"
COMPILE = "[COMPILE]"
EXTEND = "[EXTEND]"
CONFIG = "[CONFIG]"
CLI = "[CLI]"
