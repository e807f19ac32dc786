from lendtrack.utils.timefmt import iso


def loan_to_dict(loan, display_status=None):
    data = {
        "id": loan.id,
        "type": loan.borrower_kind,
        "name": loan.name,
        "email": loan.email,
        "phone": loan.phone,
        "equipment_id": loan.equipment_id,
        "equipment_name": loan.equipment_label,
        "start_time": iso(loan.start_time),
        "end_time": iso(loan.end_time),
        "status": loan.status,
        "created_at": iso(loan.created_at),
    }
    if loan.borrower_kind == "student":
        data.update({
            "student_id": loan.student_id,
            "department": loan.department,
            "course": loan.course,
            "year": loan.year,
        })
    else:
        data.update({
            "address": loan.address,
            "affiliation_or_office": loan.affiliation_or_office,
        })
    if display_status is not None:
        data["displayStatus"] = display_status
    return data


def equipment_to_dict(e):
    return {
        "id": e.id,
        "name": e.name,
        "serial_number": e.serial_number,
        "model": e.model,
        "description": e.description,
        "created_at": iso(e.created_at),
    }


def consultation_to_dict(c):
    data = {
        "id": c.id,
        "type": c.borrower_kind,
        "name": c.name,
        "email": c.email,
        "phone": c.phone,
        "purpose": c.purpose,
        "appointment_date": iso(c.appointment_date),
        "created_at": iso(c.created_at),
    }
    if c.borrower_kind == "student":
        data.update({
            "student_id": c.student_id,
            "department": c.department,
            "course": c.course,
            "year": c.year,
        })
    else:
        data.update({
            "address": c.address,
            "affiliation_or_office": c.affiliation_or_office,
        })
    return data
