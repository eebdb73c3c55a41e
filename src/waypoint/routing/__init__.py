"""Routing — path templates, an ordered route table, and the Router.

Routes are registered during setup and looked up in registration order;
the first match wins.
"""
