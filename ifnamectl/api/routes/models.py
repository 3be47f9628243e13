from typing import List

from pydantic import BaseModel

from ifnamectl.config import Config
from ifnamectl.modules.selection import RenameOptions


class RenameRequestBody(BaseModel):
    macs: List[str] = []
    names: List[str] = []
    name_policy: str = ""
    name_prefix: str = ""
    vendor: str = ""
    model: str = ""
    mc_name: str = Config.MC_NAME

    def to_options(self) -> RenameOptions:
        return RenameOptions(
            macs=tuple(m.strip() for m in self.macs if m.strip()),
            names=tuple(n.strip() for n in self.names if n.strip()),
            name_policy=self.name_policy.strip(),
            name_prefix=self.name_prefix.strip(),
            vendor=self.vendor.strip(),
            model=self.model.strip(),
            mc_name=self.mc_name,
        )
