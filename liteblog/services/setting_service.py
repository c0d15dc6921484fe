"""Site settings service.

Settings are stored as key/value rows; readers always get a complete
SiteSettings object, with defaults filling any key that has no row.
"""

import logging

from sqlalchemy.orm import Session

from ..repositories import SettingRepository
from ..schemas.setting import SiteSettings

logger = logging.getLogger(__name__)


def get_site_settings(db: Session) -> SiteSettings:
    values = SiteSettings().model_dump()
    for row in SettingRepository(db).get_all():
        if row.key in values:
            values[row.key] = row.value if row.value is not None else ""
    return SiteSettings(**values)


def update_site_settings(db: Session, data: SiteSettings) -> SiteSettings:
    """Store every key of *data*; all-or-nothing."""
    SettingRepository(db).update_multiple(data.model_dump())
    db.commit()
    logger.info("Site settings updated", extra={"keys": sorted(data.model_dump().keys())})
    return get_site_settings(db)
