"""Film roll inventory and per-job usage ledger models."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ppf_workshop.models.base import Base, CreatedAtMixin, IdMixin, enum_column
from ppf_workshop.models.enums import RollStatus


class PpfRoll(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "ppf_rolls"
    __table_args__ = (
        CheckConstraint("used_length_mm >= 0", name="ck_ppf_rolls_used_non_negative"),
        CheckConstraint("used_length_mm <= total_length_mm", name="ck_ppf_rolls_used_within_total"),
        Index("idx_ppf_rolls_product", "product_id"),
    )

    roll_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    product_id: Mapped[str] = mapped_column(ForeignKey("ppf_products.id", ondelete="RESTRICT"), nullable=False)
    batch_no: Mapped[str | None] = mapped_column(String(64))
    total_length_mm: Mapped[int] = mapped_column(Integer, nullable=False)
    used_length_mm: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[RollStatus] = mapped_column(enum_column(RollStatus), default=RollStatus.ACTIVE, nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text)

    product = relationship("PpfProduct")

    @property
    def remaining_length_mm(self) -> int:
        return self.total_length_mm - self.used_length_mm


class JobPpfUsage(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "job_ppf_usage"
    __table_args__ = (
        CheckConstraint("length_used_mm > 0", name="ck_job_ppf_usage_length_positive"),
        Index("idx_job_ppf_usage_job", "job_id"),
        Index("idx_job_ppf_usage_roll", "roll_id"),
    )

    job_id: Mapped[str] = mapped_column(ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    panel_name: Mapped[str] = mapped_column(String(120), nullable=False)
    roll_id: Mapped[str] = mapped_column(ForeignKey("ppf_rolls.id", ondelete="RESTRICT"), nullable=False)
    length_used_mm: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(Text)
