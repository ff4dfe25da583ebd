from hanoi_scores.main import run

run()
