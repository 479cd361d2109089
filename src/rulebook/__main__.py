from rulebook.cli import main

main(prog_name="rulebook")
