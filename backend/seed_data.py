"""
Seed script for a fresh dev database: categories, a verified organizer
and a handful of active campaigns.
Run: python backend/seed_data.py
"""
import sys
from pathlib import Path

# Add backend to path
backend_path = Path(__file__).resolve().parent
sys.path.insert(0, str(backend_path))

from berbagipath.database import SessionLocal, engine, Base
from berbagipath.campaign_models import Campaign
from berbagipath.category_models import Category
from berbagipath.user_models import User
from berbagipath.security import hash_password
from berbagipath.utils import slugify
import datetime

Base.metadata.create_all(bind=engine)

CATEGORIES = [
    {"id": "medical", "name": "Kesehatan", "icon": "Heart", "color": "bg-red-100 text-red-600"},
    {"id": "education", "name": "Pendidikan", "icon": "GraduationCap", "color": "bg-blue-100 text-blue-600"},
    {"id": "zakat", "name": "Zakat", "icon": "HandHeart", "color": "bg-emerald-100 text-emerald-600"},
    {"id": "disaster", "name": "Bencana Alam", "icon": "Home", "color": "bg-orange-100 text-orange-600"},
    {"id": "social", "name": "Sosial", "icon": "Users", "color": "bg-purple-100 text-purple-600"},
    {"id": "environment", "name": "Lingkungan", "icon": "TreePine", "color": "bg-green-100 text-green-600"},
    {"id": "animal", "name": "Hewan", "icon": "PawPrint", "color": "bg-yellow-100 text-yellow-600"},
    {"id": "infrastructure", "name": "Infrastruktur", "icon": "Building2", "color": "bg-gray-100 text-gray-600"},
]

CAMPAIGNS = [
    {"title": "Bantu Anak Yatim Mendapat Pendidikan Layak", "category_id": "education",
     "description": "Mari bersama-sama membantu anak-anak yatim untuk mendapatkan pendidikan yang layak. Dana yang terkumpul akan digunakan untuk biaya sekolah, buku, dan perlengkapan belajar.",
     "image_url": "https://images.unsplash.com/photo-1542810634-71277d95dcbb?w=800&auto=format&fit=crop",
     "target_amount": 150000000, "current_amount": 87500000, "donor_count": 1243, "days": 23, "is_urgent": True},
    {"title": "Operasi Jantung untuk Bayi Raffa", "category_id": "medical",
     "description": "Bayi Raffa membutuhkan operasi jantung segera. Mari bantu keluarga ini untuk mendapatkan pengobatan yang layak.",
     "image_url": "https://images.unsplash.com/photo-1620841713108-18ad2b52d15c?w=800&auto=format&fit=crop",
     "target_amount": 250000000, "current_amount": 198750000, "donor_count": 3456, "days": 7, "is_urgent": True},
    {"title": "Bantuan Korban Banjir Kalimantan", "category_id": "disaster",
     "description": "Ribuan warga terdampak banjir di Kalimantan Selatan membutuhkan bantuan mendesak berupa makanan, pakaian, dan obat-obatan.",
     "image_url": "https://images.unsplash.com/photo-1728320771441-17a19df0fe4c?w=800&auto=format&fit=crop",
     "target_amount": 500000000, "current_amount": 325000000, "donor_count": 5678, "days": 14, "is_urgent": True},
    {"title": "Pembangunan Masjid Desa Terpencil", "category_id": "zakat",
     "description": "Warga desa terpencil di Sulawesi membutuhkan masjid sebagai pusat ibadah dan kegiatan sosial.",
     "image_url": "https://images.unsplash.com/photo-1591197172062-c718f82aba20?w=800&auto=format&fit=crop",
     "target_amount": 300000000, "current_amount": 156000000, "donor_count": 2134, "days": 45, "is_urgent": False},
    {"title": "Beasiswa untuk Mahasiswa Kurang Mampu", "category_id": "education",
     "description": "Program beasiswa untuk membantu mahasiswa berprestasi dari keluarga kurang mampu menyelesaikan pendidikan.",
     "image_url": "https://images.unsplash.com/photo-1527525443983-6e60c75fff46?w=800&auto=format&fit=crop",
     "target_amount": 200000000, "current_amount": 45000000, "donor_count": 567, "days": 60, "is_urgent": False},
    {"title": "Pengobatan Kanker Ibu Siti", "category_id": "medical",
     "description": "Ibu Siti (52 tahun) didiagnosis kanker payudara stadium 3 dan membutuhkan biaya kemoterapi.",
     "image_url": "https://images.unsplash.com/photo-1620841713108-18ad2b52d15c?w=800&auto=format&fit=crop",
     "target_amount": 180000000, "current_amount": 92000000, "donor_count": 1890, "days": 30, "is_urgent": True},
]

ORGANIZER = {"name": "Yayasan Cahaya Harapan", "email": "organizer@berbagipath.id", "password": "organizer123"}


def seed():
    db = SessionLocal()

    for c_data in CATEGORIES:
        if db.query(Category).filter(Category.id == c_data["id"]).first():
            print(f"⏭️  Skipped (exists): category {c_data['id']}")
            continue
        db.add(Category(slug=c_data["id"], **c_data))
        print(f"✅ Added category: {c_data['name']}")
    db.commit()

    organizer = db.query(User).filter(User.email == ORGANIZER["email"]).first()
    if not organizer:
        organizer = User(name=ORGANIZER["name"], email=ORGANIZER["email"],
                         password_hash=hash_password(ORGANIZER["password"]),
                         role="organizer", is_verified=True)
        db.add(organizer)
        db.commit()
        print(f"✅ Added organizer: {organizer.email} / {ORGANIZER['password']}")

    now = datetime.datetime.utcnow()
    for p_data in CAMPAIGNS:
        data = dict(p_data)
        days = data.pop("days")
        slug = slugify(data["title"])
        if db.query(Campaign).filter(Campaign.slug == slug).first():
            print(f"⏭️  Skipped (exists): {data['title']}")
            continue
        db.add(Campaign(slug=slug, organizer_id=organizer.id, start_date=now,
                        end_date=now + datetime.timedelta(days=days),
                        is_verified=True, status="active", **data))
        print(f"✅ Added: {data['title']}")

    db.commit()
    db.close()
    print("\n🎉 Seeding completed!")


if __name__ == "__main__":
    seed()
