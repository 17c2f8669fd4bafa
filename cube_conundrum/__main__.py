from cube_conundrum.soln import run

run()
