"""Utilidades compartidas: logging, excepciones, constantes, tema."""
