"""Routing — route reload policy and the forced-reload decision engine.

Route matching itself belongs to the host router; navkit only reads the
active route's policy and asks the router to reload when it would not.
"""
