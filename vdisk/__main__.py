from vdisk.cli import app

app(prog_name="vdisk")
