"""Agent Tracker: sales activity goals and commission tracking."""
