"""Persistence of browsers and rules"""
