"""
Synthetic strategy preview engine.

Provides unified interfaces for:
- Deterministic synthetic price series (line and candle shapes)
- Indicator calculations (EMA, Wilder RSI, band envelope)
- Rule-based signal generation for five strategy types
- Simulated round-trip P&L from generated signals
"""
