from .logo_detector import LogoRegionDetector

__all__ = ["LogoRegionDetector"]
