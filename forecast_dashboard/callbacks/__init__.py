"""Callbacks de Dash; importar el modulo registra los callbacks"""
