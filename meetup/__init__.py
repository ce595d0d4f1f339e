"""Meetup participation and capacity coordinator."""
