"""HTTP surface for the workspace store and conversion tools."""
