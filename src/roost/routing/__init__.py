"""Routing — the ordered route table controllers register against.

Routes are added while controllers activate and compiled into an
immutable lookup structure once startup completes.
"""
