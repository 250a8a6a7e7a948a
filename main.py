import sys

from rich.pretty import pprint

from cmdtree import Parser, invoke

docker = Parser("docker", "a tiny container front-end")
docker.option("config", "c", "location of client config files")
docker.flag("debug", "D", "enable debug mode")

docker.command("run", "create and run a new container") \
    .flag("detach", "d", "run container in background") \
    .option("name", "", "assign a name to the container") \
    .option("restart", "", "restart policy", "no", "always", "on-failure") \
    .positional("image") \
    .action(pprint)

images = docker.command("image", "manage images")
images.command("ls", "list images").flag("all", "a", "show all images").action(pprint)


if __name__ == '__main__':
    sys.exit(invoke(docker, sys.argv[1:]))
