"""Sync Figma icons into an SVG sprite and TypeScript typings."""
