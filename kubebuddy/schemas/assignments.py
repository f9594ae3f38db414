""" KubeBuddy Assignment Schema. """

from pydantic import BaseModel, ConfigDict, Field


class Assignment(BaseModel):
    """ A service deployed on a node. """
    id: str = Field(default="", description="Assignment identifier.")
    service_id: str = Field(..., description="Assigned service.")
    node_id: str = Field(..., description="Node hosting the service.")
    quantity: int = Field(default=1, ge=0, description="Number of instances (0 is read as 1).")

    model_config = ConfigDict(extra="forbid")

    @property
    def effective_quantity(self) -> int:
        """ Number of instances, an unset (zero) quantity counts as one. """
        return self.quantity or 1
