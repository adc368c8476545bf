"""
CLI entry points for the preview engine.

Provides command-line interfaces for:
- Running a strategy preview (signals and simulated P&L)
- Printing the parameter reference
"""
