"""Slack ``/meet`` slash command backed by Google Calendar."""
