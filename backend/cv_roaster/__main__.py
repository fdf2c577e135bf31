from cv_roaster.main import run

run()
