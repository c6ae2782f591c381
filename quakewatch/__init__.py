"""QuakeWatch: a desktop viewer for the USGS earthquake event feed."""
