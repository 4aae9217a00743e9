"""Entities and tiles of the top-down sample game."""