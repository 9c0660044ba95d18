"""Modelos y entidades del dominio.

Por qué:
- Aquí viven los payloads de cada vendor (Pydantic v2).
- El dominio no conoce HTTP ni CLI: solo la forma de los datos.
"""
