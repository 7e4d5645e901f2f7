"""PyQt5 front end for the hue ordering exercise."""
