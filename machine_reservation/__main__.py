from machine_reservation.main import main


raise SystemExit(main())
