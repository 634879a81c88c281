from services.ini_file import IniFile
from services.ini_service import IniService

__all__ = ["IniFile", "IniService"]
