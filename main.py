from nhl_player_db.cli import run

if __name__ == "__main__":
    run()
