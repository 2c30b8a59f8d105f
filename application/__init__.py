"""
Application Layer for the strength progress core.

This package contains:
- ports/: Abstract interfaces (what the core needs)
- use_cases/: Session write workflows that keep records and caches consistent
- exceptions: Errors raised by adapters and handled by services
"""
