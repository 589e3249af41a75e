"""
pmon - Performance Monitor CLI.

Inspects a project directory, infers its technology stack (project type,
framework, build tool) and emits a performance-oriented report as console
text, JSON or HTML.
"""

__version__ = "0.1.0"
