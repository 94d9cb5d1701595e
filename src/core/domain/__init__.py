"""Dominio: vocabulario de la API, parámetros, entidades y envelopes.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce httpx, la CLI ni el transporte: solo reviews,
  preguntas, productos y los parámetros que los piden.
"""
