from __future__ import annotations

from datetime import date as Date
from enum import Enum

from pydantic import BaseModel, Field

from barbershop.domain.entities.appointment import Appointment
from barbershop.domain.entities.catalog import Barber, Service
from barbershop.domain.entities.customer import Customer
from barbershop.domain.entities.gallery import GalleryImage
from barbershop.domain.entities.inventory import InventoryItem


class ServiceSchema(BaseModel):
    name: str
    price: str
    description: str

    @classmethod
    def from_domain(cls, service: Service) -> "ServiceSchema":
        return cls(name=service.name, price=service.price, description=service.description)


class BarberSchema(BaseModel):
    name: str
    specialty: str
    img: str

    @classmethod
    def from_domain(cls, barber: Barber) -> "BarberSchema":
        return cls(name=barber.name, specialty=barber.specialty, img=barber.img)


class TimeSlotsSchema(BaseModel):
    slots: list[str]


class AvailabilitySchema(BaseModel):
    barber: str | None = None
    date: Date | None = None
    available: list[str]
    taken: list[str] = Field(default_factory=list)


class CustomerSchema(BaseModel):
    id: int
    name: str
    email: str
    phone: str

    @classmethod
    def from_domain(cls, customer: Customer) -> "CustomerSchema":
        return cls(id=customer.id, name=customer.name, email=customer.email, phone=customer.phone)


class CustomerDetailsSchema(BaseModel):
    name: str = Field(min_length=1)
    email: str
    phone: str = ""


class BookingRequestSchema(BaseModel):
    service: str
    barber: str
    date: Date
    time: str
    customer: CustomerDetailsSchema


class AppointmentSchema(BaseModel):
    id: int
    customer_id: int
    service: ServiceSchema
    barber: BarberSchema
    date: Date
    time: str
    customer: CustomerSchema | None = None

    @classmethod
    def from_domain(cls, appointment: Appointment) -> "AppointmentSchema":
        return cls(
            id=appointment.id,
            customer_id=appointment.customer_id,
            service=ServiceSchema.from_domain(appointment.service),
            barber=BarberSchema.from_domain(appointment.barber),
            date=appointment.date,
            time=appointment.time,
            customer=CustomerSchema.from_domain(appointment.customer) if appointment.customer else None,
        )


class CustomerHistorySchema(BaseModel):
    upcoming: list[AppointmentSchema]
    past: list[AppointmentSchema]


class CalendarDaySchema(BaseModel):
    date: Date
    appointments: list[AppointmentSchema]


class InventoryCreateSchema(BaseModel):
    name: str = Field(min_length=1)
    brand: str = ""
    category: str = ""
    stock: int = Field(default=0, ge=0)
    low_stock_threshold: int = Field(default=5, ge=0)


class InventoryUpdateSchema(BaseModel):
    name: str | None = None
    brand: str | None = None
    category: str | None = None
    stock: int | None = Field(default=None, ge=0)
    low_stock_threshold: int | None = Field(default=None, ge=0)


class StockAdjustSchema(BaseModel):
    delta: int


class InventoryItemSchema(BaseModel):
    id: int
    name: str
    brand: str
    category: str
    stock: int
    low_stock_threshold: int
    is_low: bool

    @classmethod
    def from_domain(cls, item: InventoryItem) -> "InventoryItemSchema":
        return cls(
            id=item.id,
            name=item.name,
            brand=item.brand,
            category=item.category,
            stock=item.stock,
            low_stock_threshold=item.low_stock_threshold,
            is_low=item.is_low,
        )


class GalleryCreateSchema(BaseModel):
    src: str = Field(min_length=1)
    alt: str = ""
    barber_name: str


class GalleryImageSchema(BaseModel):
    id: int
    src: str
    alt: str
    barber_name: str

    @classmethod
    def from_domain(cls, image: GalleryImage) -> "GalleryImageSchema":
        return cls(id=image.id, src=image.src, alt=image.alt, barber_name=image.barber_name)


class SalesMetricsSchema(BaseModel):
    total_revenue: int
    service_counts: dict[str, int]
    barber_counts: dict[str, int]
    most_popular_service: str | None = None
    most_popular_barber: str | None = None
    past_appointment_count: int


class RegisterSchema(BaseModel):
    name: str
    email: str
    phone: str = ""
    password: str


class LoginSchema(BaseModel):
    username: str
    password: str


class UserSchema(BaseModel):
    username: str
    role: str
    customer_id: int | None = None


class HairLength(str, Enum):
    short = "short"
    medium = "medium"
    long = "long"
    any = "any"


class HairStyle(str, Enum):
    classic = "classic"
    modern = "modern"
    casual = "casual"
    any = "any"


class ImageUploadSchema(BaseModel):
    image_base64: str = Field(min_length=1)
    mime_type: str = "image/jpeg"


class FaceAnalysisSchema(BaseModel):
    face_shape: str
    features: list[str] = Field(default_factory=list)


class RecommendationsRequestSchema(BaseModel):
    analysis: FaceAnalysisSchema
    length: HairLength = HairLength.any
    style: HairStyle = HairStyle.any
    with_examples: bool = False


class RecommendationSchema(BaseModel):
    name: str
    description: str
    example_image: str | None = None


class ExampleImageRequestSchema(BaseModel):
    name: str
    face_shape: str


class SimulateRequestSchema(ImageUploadSchema):
    name: str


class ImageRefSchema(BaseModel):
    image: str
