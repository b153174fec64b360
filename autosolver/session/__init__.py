"""Page capabilities, exercise runner and lesson orchestration."""
