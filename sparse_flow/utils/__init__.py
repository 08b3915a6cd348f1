"""Raster utilities: gradients, smoothing, pyramids and sampling."""
