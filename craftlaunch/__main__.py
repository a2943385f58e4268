from craftlaunch.mine import app

app(prog_name="craftlaunch")
