from typing import List, Optional


class TypesetError(Exception):
    """Excepción base del núcleo tipográfico."""
    pass


class ParseError(TypesetError):
    """Entrada estructural mal formada (p.ej. un frame sin ParagraphStyleRange)."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        self.file_path = file_path
        if file_path:
            message = f"{message} (en '{file_path}')"
        super().__init__(message)


class StyleNotFoundError(TypesetError):
    """Un identificador de estilo referenciado no existe en el diccionario."""

    def __init__(self, style_id: str, style_kind: str):
        self.style_id = style_id
        self.style_kind = style_kind
        super().__init__(f"{style_kind} style '{style_id}' not found")


class InheritanceCycleError(TypesetError):
    """La cadena BasedOn de un estilo se revisita a sí misma."""

    def __init__(self, style_id: str, cycle: List[str]):
        self.style_id = style_id
        self.cycle = list(cycle)
        chain = " → ".join(self.cycle + [style_id])
        super().__init__(f"Inheritance cycle detected: {chain}")


class MissingFontError(TypesetError):
    """Una familia tipográfica resuelta no tiene fuente disponible."""

    def __init__(self, font_family: str, context: Optional[str] = None):
        self.font_family = font_family
        self.context = context
        message = f"Font '{font_family}' is not available"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)


# --- Errores del decodificador externo: se propagan sin traducir ---

class CorruptedFileError(TypesetError):
    def __init__(self, file_path: str, reason: str):
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"Corrupted IDML file '{file_path}': {reason}")


class InvalidXmlError(TypesetError):
    def __init__(self, xml_path: str, details: str):
        self.xml_path = xml_path
        self.details = details
        super().__init__(f"Invalid XML in '{xml_path}': {details}")


class MissingFileError(TypesetError):
    def __init__(self, required_file: str):
        self.required_file = required_file
        super().__init__(f"Required file '{required_file}' is missing from the IDML package")
