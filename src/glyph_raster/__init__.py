"""Render text to raster images from hand-authored vector glyphs."""
