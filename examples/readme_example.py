from enum import Enum

from lookupgraph import BOOLEAN, Catalog, LoadPolicy


class Region(Enum):
    EU = "eu"
    US = "us"


catalog = Catalog()


@catalog.declare
def Carrier(t):
    t.attribute("id", int)
    t.attribute("name", str)
    t.attribute("region", Region)
    t.has_many("shipping_methods")


@catalog.declare
def ShippingMethod(t):
    """Base type; entries name their concrete subtype in ``type``."""
    t.attribute("id", int)
    t.attribute("type", str)
    t.attribute("name", str)
    t.attribute("carrier_id", int)
    t.attribute("price_cents", int)
    t.attribute("tracked", BOOLEAN)
    t.belongs_to("carrier")
    t.monetize("price_cents")


@catalog.declare(parent=ShippingMethod)
def ExpressMethod(t):
    t.attribute("max_days", int)


Carrier.register_many(
    [
        {"id": 1, "name": "Postal", "region": Region.EU},
        {"id": 2, "name": "Courier", "region": Region.US},
    ],
    policy=LoadPolicy.DEFERRED,
)
ShippingMethod.register_many(
    [
        {"id": 10, "name": "Letter", "carrier_id": 1, "price_cents": 150},
        {
            "id": 11,
            "type": "ExpressMethod",
            "name": "Overnight",
            "carrier_id": 2,
            "price_cents": 2499,
            "tracked": True,
            "max_days": 1,
        },
    ],
    policy=LoadPolicy.DEFERRED,
    allow_type_discriminator=True,
)
catalog.lock_all()


if __name__ == "__main__":
    for method in ShippingMethod:
        kind = method.lookup_type.name
        print(f"{method.name} ({kind}) via {method.carrier().name}: {method.price}")

    overnight = ShippingMethod.find("11")
    print(f"Tracked: {overnight.is_tracked()}, max days: {overnight.max_days}")
    print(f"EU carriers: {[c.name for c in Carrier.where(region='eu')]}")
    print(f"Courier methods: {[m.name for m in Carrier.find(2).shipping_methods()]}")
