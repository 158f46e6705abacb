import uvicorn

from testportal.core.config import HOST, PORT


def main() -> None:
    uvicorn.run("testportal.main:app", host=HOST, port=PORT)


if __name__ == "__main__":
    main()
