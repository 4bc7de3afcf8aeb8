"""
This is the main file to run the game.
It imports the run function from the cat_invaders app and runs it.
"""

from cat_invaders.app import run

if __name__ == "__main__":
    raise SystemExit(run())
