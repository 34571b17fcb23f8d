import pytest
from autoparse.lib.context import RenderContext, RequestStores
from autoparse.models.value import ObjectHandle


class Cookie(ObjectHandle):
    properties = ("tasty", "type", "weight_grams", "price", "ingredients")
    methods = ("describe", "crumble")

    def __init__(self) -> None:
        self.tasty = 100
        self.type = "Chocolate Chip"
        self.weight_grams = 5.0
        self.price = 1.25
        self.ingredients = ["Flour", "Sugar", "Butter", "Chocolate Chips"]
        self.secret = "do not expose"

    def describe(self, prefix: str = "") -> str:
        return f"{prefix}{self.type}"

    def crumble(self) -> str:
        raise RuntimeError("cookie crumbled")


@pytest.fixture
def cookie():
    return Cookie()


@pytest.fixture
def context(cookie):
    ctx = RenderContext(
        stores=RequestStores(
            query={"q": "<b>search</b>", "page": "2"},
            form={"comment": "it's \"quoted\" & <tagged>"},
            cookies={"theme": "dark"},
            server={"REQUEST_METHOD": "GET"},
            session={"user": {"name": "Ada", "roles": ["admin", "dev"]}, "token": "abc"},
        ),
        globals={
            "cookie_obj": cookie,
            "cart": {"items": [1, 2, 3, 4], "title": "Groceries", "note": None},
            "nothing": None,
        },
    )
    ctx.functions.register("greet", lambda who="world": f"Hello {who}")
    ctx.functions.register("join", lambda *parts: "|".join(str(p) for p in parts))
    ctx.functions.register("echo", lambda value=None: value)
    return ctx
