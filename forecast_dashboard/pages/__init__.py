"""Paginas de la aplicacion"""
