"""DailyScry - posts a random Magic: The Gathering card every day."""
