"""Services layer: manifest, rendering, publishing."""
