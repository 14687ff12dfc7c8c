"""Infrastructure capabilities the bus core calls into."""
