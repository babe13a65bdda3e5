from .cli import cli


def launch():
    cli(prog_name='certoscribe')


if __name__ == '__main__':
    launch()
