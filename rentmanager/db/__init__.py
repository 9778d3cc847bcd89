"""Declarative base and timestamp helpers shared by the models"""
