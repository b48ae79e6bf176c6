from urlmapping import App, HTTPResponse, Router, VariableType

router = Router()
app = App(router)

PRODUCTS = {1: {"id": 1, "name": "Keyboard"}, 13: {"id": 13, "name": "Mouse"}}


@app.get("/products", name="list")
async def list_products(request, match):
    return list(PRODUCTS.values())


@app.get("/products/{id}", VariableType.INTEGER, name="show")
async def show_product(request, match):
    product = PRODUCTS.get(match.variable("id"))
    if product is None:
        return HTTPResponse(404, [(b"content-type", b"application/json")], {"detail": "Not Found"})
    return product


@app.get("/products/{id}/images/{imgId}", VariableType.INTEGER, VariableType.LONG)
async def show_image(request, match):
    return {"product": match.variable("id"), "image": match.variable("imgId")}


@app.post("/products/", name="create")
async def create_product(request, match):
    product = request.body_as_dict
    PRODUCTS[product["id"]] = product
    return HTTPResponse(201, [(b"content-type", b"application/json")], product)


@app.post("/products/{id}/discounts/{amount}", VariableType.LONG, VariableType.DECIMAL)
def add_discount(request, match):
    return {"product": match.variable("id"), "discount": match.variable("amount")}


# Named patterns without handlers classify paths for code that only inspects
# the match, e.g. an authorization check in front of the app.
guarded = Router().get("admin", "/admin/{section}").get("logout", "/logout")
