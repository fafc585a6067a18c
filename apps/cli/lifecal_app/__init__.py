"""Command line app for life calendar wallpapers."""
