"""Exercise Tracker API: users and their exercise logs over HTTP."""
