import uvicorn

from promptgen import config


def main():
    uvicorn.run(
        "promptgen.main:app",
        host=config.HOST,
        port=config.PORT,
    )


if __name__ == "__main__":
    main()
