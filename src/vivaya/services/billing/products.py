"""Fixed product registry; its order is the pivot column order."""

from __future__ import annotations

from ...models.domain import ProductDef

ProductRegistry = tuple[ProductDef, ...]

PRODUCT_REGISTRY: ProductRegistry = (
    ProductDef("ABO_MOIS_ESSENTIEL", "Abo mois – Essentiel"),
    ProductDef("ABO_MOIS_KEEFONPLUS", "Abo mois – Keefon+"),
    ProductDef("ABO_TRIMESTRE_ESSENTIEL", "Abo trim. – Essentiel"),
    ProductDef("ABO_TRIMESTRE_KEEFONPLUS", "Abo trim. – Keefon+"),
    ProductDef("COEUR_UNITE", "Cœur (unité)"),
    ProductDef("COEUR_PACK", "Cœurs (pack)"),
    ProductDef("COEUR_PACK_EXTRA", "Cœurs (pack extra)"),
    ProductDef("ECHOCOEUR_UNITE", "Écho-cœur (unité)"),
    ProductDef("ECHOCOEUR_PACK", "Écho-cœurs (pack)"),
    ProductDef("ECHOCOEUR_PACK_EXTRA", "Écho-cœurs (pack extra)"),
)

PRODUCT_IDS: list[str] = [product.id for product in PRODUCT_REGISTRY]


def label_for(product_id: str, registry: ProductRegistry = PRODUCT_REGISTRY) -> str:
    """Display label for a product id; unknown ids are shown as-is."""
    for product in registry:
        if product.id == product_id:
            return product.label
    return product_id
