"""Pokedex favorites backend: cached PokeAPI catalog plus persisted favorites."""
