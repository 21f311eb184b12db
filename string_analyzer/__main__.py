import uvicorn

from string_analyzer.config import settings


if __name__ == "__main__":
    uvicorn.run("string_analyzer.main:app", host=settings.HOST, port=settings.PORT)
