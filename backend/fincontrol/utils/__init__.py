# Utility helpers shared by the view layer.
