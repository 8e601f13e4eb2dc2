"""Two-column next-arrivals board for Muni stops, rendered as a PNG."""
