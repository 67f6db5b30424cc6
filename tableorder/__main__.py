from tableorder.main import run

run()
