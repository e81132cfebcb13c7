"""
Запуск API под uvicorn.

Пример:
  python -m canteen
  uvicorn canteen.main:app --reload
"""
import uvicorn

from canteen.config import settings


def main() -> None:
    uvicorn.run(
        "canteen.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=settings.APP_RELOAD,
    )


if __name__ == "__main__":
    main()
