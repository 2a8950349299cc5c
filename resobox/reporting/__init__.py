"""Preview plots for layout runs."""
