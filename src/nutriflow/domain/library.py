"""Built-in catalog of common foods for quick meal entry."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LibraryFood:
    """Reference nutrition values for a typical portion."""

    name: str
    calories: int
    protein: int
    carbs: int
    fat: int
    portion: str


FOOD_LIBRARY: tuple[LibraryFood, ...] = (
    LibraryFood("Arroz Branco Cozido", 128, 2, 28, 0, "100g"),
    LibraryFood("Feijão Carioca Cozido", 77, 5, 14, 0, "100g"),
    LibraryFood("Frango Grelhado", 165, 31, 0, 4, "100g"),
    LibraryFood("Carne Bovina Moída", 215, 26, 0, 12, "100g"),
    LibraryFood("Ovo Cozido", 77, 6, 1, 5, "1 unidade (50g)"),
    LibraryFood("Ovo Mexido (2 unid.)", 182, 13, 2, 14, "2 ovos + manteiga"),
    LibraryFood("Pão Francês", 150, 5, 28, 2, "1 unidade (50g)"),
    LibraryFood("Banana Prata", 98, 1, 26, 0, "1 unidade média"),
    LibraryFood("Maçã", 52, 0, 14, 0, "1 unidade média (100g)"),
    LibraryFood("Batata Doce Cozida", 86, 2, 20, 0, "100g"),
    LibraryFood("Aveia em Flocos", 394, 14, 67, 8, "100g"),
    LibraryFood("Whey Protein (1 scoop)", 120, 24, 3, 2, "30g"),
    LibraryFood("Leite Desnatado", 35, 3, 5, 0, "100ml"),
    LibraryFood("Iogurte Grego Natural", 97, 9, 4, 5, "100g"),
    LibraryFood("Queijo Minas Frescal", 264, 17, 3, 21, "100g"),
    LibraryFood("Tapioca com Queijo", 250, 8, 45, 5, "1 unidade (80g)"),
    LibraryFood("Granola", 440, 10, 66, 16, "100g"),
    LibraryFood("Abacate", 160, 2, 9, 15, "100g"),
    LibraryFood("Amendoim Torrado", 567, 26, 16, 49, "100g"),
    LibraryFood("Azeite de Oliva", 884, 0, 0, 100, "100ml"),
    LibraryFood("Pasta de Amendoim", 588, 25, 20, 50, "100g"),
    LibraryFood("Prato Feito (Básico)", 650, 35, 70, 20, "arroz+feijão+carne+salada"),
    LibraryFood("Salada Mista", 25, 2, 4, 0, "100g"),
    LibraryFood("Salmão Grelhado", 208, 20, 0, 13, "100g"),
    LibraryFood("Macarrão Cozido", 131, 5, 25, 1, "100g"),
)
