import pathlib

TEST_DATA_PATH = pathlib.Path("tests", "data").absolute()
