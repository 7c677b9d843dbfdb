"""
Pokémon Quiz - A terminal game for naming all 151 original Pokémon

The player types Pokémon names one at a time:
- correct names are revealed in a grid of the whole Pokédex
- repeated or unknown names are reported and the game carries on
- the game ends once every Pokémon has been found

An optional live timer shows how long the run has taken.
"""

__version__ = "1.0.0"
