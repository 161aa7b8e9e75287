"""Pure domain rules: defaults, text helpers, forms, schedules and trackers."""
