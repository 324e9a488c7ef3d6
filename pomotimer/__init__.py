"""Pomotimer: a work/break countdown backend for desktop front ends."""
