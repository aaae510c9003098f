"""Civil dates, data models and recurrence expansion."""
