# storefront/domain/shipping.py
"""
Strefy wysylki: miasto docelowe -> strefa -> stawka i czas dostawy.

Czysta tabela, bez stanu i bez I/O, wiec wynik mozna cache'owac bez konca.
"""
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable, Protocol


class City(str, Enum):
    CAIRO = "Cairo"
    ALEXANDRIA = "Alexandria"
    GIZA = "Giza"
    SHUBRA_EL_KHEIMA = "ShubraElKheima"
    PORT_SAID = "PortSaid"
    SUEZ = "Suez"
    LUXOR = "Luxor"
    MANSOURA = "Mansoura"
    EL_MAHALLA_EL_KUBRA = "ElMahallaElKubra"
    TANTA = "Tanta"
    ASYUT = "Asyut"
    ISMAILIA = "Ismailia"
    FAIYUM = "Faiyum"
    ZAGAZIG = "Zagazig"
    DAMIETTA = "Damietta"
    ASWAN = "Aswan"
    MINYA = "Minya"
    DAMANHUR = "Damanhur"
    BENI_SUEF = "BeniSuef"
    HURGHADA = "Hurghada"


class Zone(str, Enum):
    CAPITAL = "capital"
    NEARBY = "nearby"
    DELTA = "delta"
    OTHER = "other"


@dataclass(frozen=True)
class DeliveryEstimate:
    min_days: int
    max_days: int
    rate: Decimal


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    shipping: Decimal
    total: Decimal


class PricedLine(Protocol):
    price: Decimal
    quantity: int


ZONE_CITIES = {
    Zone.CAPITAL: frozenset({City.CAIRO, City.GIZA, City.SHUBRA_EL_KHEIMA}),
    Zone.NEARBY: frozenset({City.ALEXANDRIA, City.SUEZ, City.ISMAILIA, City.PORT_SAID, City.FAIYUM, City.BENI_SUEF}),
    Zone.DELTA: frozenset({City.MANSOURA, City.TANTA, City.EL_MAHALLA_EL_KUBRA, City.ZAGAZIG, City.DAMIETTA, City.DAMANHUR}),
}

DELIVERY_ESTIMATES = {
    Zone.CAPITAL: DeliveryEstimate(min_days=1, max_days=2, rate=Decimal("50.00")),
    Zone.NEARBY: DeliveryEstimate(min_days=2, max_days=3, rate=Decimal("65.00")),
    Zone.DELTA: DeliveryEstimate(min_days=2, max_days=4, rate=Decimal("75.00")),
    Zone.OTHER: DeliveryEstimate(min_days=4, max_days=7, rate=Decimal("100.00")),
}


def zone_for(city: City) -> Zone:
    city = City(city)
    for zone, cities in ZONE_CITIES.items():
        if city in cities:
            return zone
    return Zone.OTHER


def estimate(city: City) -> DeliveryEstimate:
    return DELIVERY_ESTIMATES[zone_for(city)]


def shipping_rate(city: City) -> Decimal:
    return estimate(city).rate


def subtotal(items: Iterable[PricedLine]) -> Decimal:
    return sum((Decimal(str(i.price)) * i.quantity for i in items), Decimal("0.00"))


def cost(items: Iterable[PricedLine], city: City) -> Totals:
    """Subtotal linii koszyka + stawka strefy dla miasta docelowego."""
    sub = subtotal(items)
    shipping = shipping_rate(city)
    return Totals(subtotal=sub, shipping=shipping, total=sub + shipping)
