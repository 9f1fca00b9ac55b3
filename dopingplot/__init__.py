"""Alpe d'Huez doping scatterplot: fetch, parse, render."""
