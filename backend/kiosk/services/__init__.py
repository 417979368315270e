"""Game logic for the slot kiosk.

Each module works against the database session and raises kiosk.errors
exceptions; the blueprint and socket handlers only translate requests.
"""
