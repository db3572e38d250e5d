from skillstream import app

app(prog_name="skillstream")
