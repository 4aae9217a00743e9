"""Entities, tiles and the player of the platformer sample game."""