"""Calendar providers: Google Calendar and an in-memory mock"""
