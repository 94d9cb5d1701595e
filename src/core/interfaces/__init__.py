"""Contratos del Core (`Transport`, `AnalyticsSink`).

Por qué:
- Los adaptadores concretos (httpx, sinks de analítica) los implementan por
  duck typing.
- Las queries dependen de estas abstracciones, nunca de httpx.
"""
