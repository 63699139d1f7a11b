"""
SUSPEND - Config Loader Implementation
Charge la configuration depuis un fichier YAML et la valide.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from ..logging.interfaces import IStructuredLogger
from .interfaces import IConfigLoader, SuspendConfig, SuspendError


class ConfigIntegrityError(SuspendError):
    """Erreur d'intégrité de configuration."""

    pass


class ConfigLoader(IConfigLoader):
    """Chargement de la configuration depuis fichiers YAML."""

    DEFAULT_PATH = "fixtures/configs/suspend.yaml"

    def __init__(self, config_path: str = DEFAULT_PATH, logger: Optional[IStructuredLogger] = None):
        self.config_path = Path(config_path)
        self._logger = logger

    def load(self, path: Optional[str] = None) -> SuspendConfig:
        """
        Charge la configuration.

        Args:
            path: Chemin du fichier (défaut: chemin donné au constructeur)

        Returns:
            Configuration validée

        Raises:
            ConfigIntegrityError: Si fichier inexistant ou structure invalide
        """
        config_file = Path(path) if path is not None else self.config_path

        if not config_file.exists():
            raise ConfigIntegrityError(f"Configuration non trouvée: {config_file}")

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigIntegrityError(f"Erreur de parsing YAML: {e}")
        except OSError as e:
            raise ConfigIntegrityError(f"Erreur de lecture fichier: {e}")

        # Fichier vide = configuration par défaut
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ConfigIntegrityError("Configuration doit être un objet YAML")

        # Section racine optionnelle "suspend:"
        if set(data.keys()) == {"suspend"} and isinstance(data["suspend"], dict):
            data = data["suspend"]

        config = self.from_dict(data)

        if self._logger is not None:
            self._logger.info(
                "Configuration loaded",
                path=str(config_file),
                ip_resolver=config.ip_resolver,
                timezone=config.timezone,
            )

        return config

    def from_dict(self, data: Dict[str, Any]) -> SuspendConfig:
        """
        Construit la configuration depuis un dictionnaire.

        Raises:
            ConfigIntegrityError: Si une valeur est invalide ou une clé inconnue
        """
        try:
            return SuspendConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigIntegrityError(f"Configuration invalide: {e}")
